import sentry_sdk
from flask import abort, Flask, flash, redirect, render_template, request
from sentry_sdk.integrations.flask import FlaskIntegration
import os
from typing import Any, Dict


if os.getenv("SENTRY_DSN"):
    sentry_sdk.init(
        integrations=[FlaskIntegration()],
        traces_sample_rate=0
    )


import factastic.web.lib as lib
from factastic.types import ALL, COUNTERS, is_category, is_disputed, category_color
from factastic.view import ViewState


app = Flask(__name__)
app.secret_key = os.getenv('FLASK_SECRET')


@app.context_processor
def fact_utilities() -> Dict[str, Any]:
    return dict(is_disputed=is_disputed, category_color=category_color, all_categories=ALL)


def flash_error(view: ViewState) -> None:
    error = view.pop_error()
    if error:
        flash(error, 'error')


@app.route("/")
def index():  # type: ignore
    view = lib.get_view()
    return render_template('index.html', title='Factastic', view=view, alert=view.pop_alert())


@app.route("/toggle", methods=['POST'])
def toggle():  # type: ignore
    lib.get_view().toggle_form()
    return redirect('/')


@app.route("/category/<name>", methods=['POST'])
def category(name):  # type: ignore
    if name != ALL and not is_category(name):
        abort(404)

    lib.get_view().set_category(name)
    return redirect('/')


@app.route("/facts", methods=['POST'])
def submit():  # type: ignore
    view = lib.get_view()
    view.submit_fact(
        text=request.form.get('text', ''),
        source=request.form.get('source', ''),
        category=request.form.get('category', ''),
    )
    flash_error(view)
    return redirect('/')


@app.route("/facts/<int:fact_id>/<counter>", methods=['POST'])
def vote(fact_id, counter):  # type: ignore
    if counter not in COUNTERS:
        abort(404)

    view = lib.get_view()
    try:
        view.vote(fact_id, counter)
    except KeyError:
        abort(404)

    flash_error(view)
    return redirect('/')
