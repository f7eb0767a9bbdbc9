from setuptools import setup

setup(name='factastic',
      version='0.1',
      description='Share and vote on short facts',
      url='http://github.com/srynot4sale/factastic',
      author='Aaron Barnes',
      author_email='aaron@io.nz',
      license='MIT',
      packages=['factastic', 'factastic.store', 'factastic.web'],
      package_data={'factastic.web': ['templates/*.html', 'static/*.css']},
      install_requires=[
          'flask',
          'structlog',
          'sentry-sdk[flask]',
          'supabase',
          'postgrest',
          'httpx'
      ],
      extras_require={
          'test': [
              'pytest',
              'pyyaml'
          ]
      },
      zip_safe=False)
