import yaml
from typing import Any, Callable, Dict, List


from factastic.types import Fact
from factastic.view import Result, ViewState


def run_step(facts: Any, view: ViewState, step: Dict[str, Any]) -> Result:
    if 'load' in step:
        return view.load(step['load'])
    if 'category' in step:
        return view.set_category(step['category'])
    if 'toggle' in step:
        return view.toggle_form()
    if 'submit' in step:
        s = step['submit']
        return view.submit_fact(text=str(s.get('text', '')), source=s.get('source', ''), category=s.get('category', ''))
    if 'vote' in step:
        v = step['vote']
        return view.vote(facts.find(v['text']).id, v['counter'])
    raise Exception(f'Unknown step {step}')


def assert_facts(actual: List[Fact], expected: List[Dict[str, Any]]) -> None:
    "Compare only the fields mentioned in the expected facts, in order"
    assert len(actual) == len(expected), f'{actual} vs {expected}'
    for fact, e in zip(actual, expected):
        row = fact.to_row()
        assert {k: row[k] for k in e} == e


def yamltest(func: Callable[[Any], str]) -> Callable[[Any], None]:
    def wrapper(facts):  # type: ignore
        yml = func(facts)
        testdef = yaml.safe_load(yml)
        if not testdef:
            return

        if 'seed' in testdef[0]:
            view = facts.seed(testdef.pop(0)['seed'] or [])
        else:
            view = facts.view

        for step in testdef:
            result = run_step(facts, view, step)
            print(f'{step} -> {result}')

            if 'status' in step:
                assert result.status == step['status']

            if 'facts' in step:
                assert_facts(view.facts, step['facts'] or [])

            if 'show_form' in step:
                assert view.show_form is step['show_form']

            if 'form' in step:
                assert vars(view.form) == step['form']

            if 'category_now' in step:
                assert view.current_category == step['category_now']

    return wrapper
