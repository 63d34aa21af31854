# Sphinx configuration file

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

from github_webhook_runner import __version__  # noqa: E402

project = 'GitHub Webhook Runner'
copyright = '2026, Trickl'
author = 'Trickl'
release = __version__
version = '.'.join(release.split('.')[:2])

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

html_theme = 'sphinx_rtd_theme'
html_title = f'{project} {release}'

# Autodoc settings: the payload models are many and self-describing.
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'special-members': '__init__, __call__',
    'exclude-members': '__weakref__, model_config, model_fields',
}
autodoc_typehints = 'description'
always_document_param_types = True

# Docstrings in the package use the Google style.
napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'jinja2': ('https://jinja.palletsprojects.com/en/stable/', None),
    'pydantic': ('https://docs.pydantic.dev/latest/', None),
}
