# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

from pyroots import __version__

# -- Project information -----------------------------------------------

project = 'pyroots'
author = 'pyroots contributors'
version = __version__  # Short X.Y version.
release = version  # Full version, including alpha/beta/rc tags.

# -- General configuration ---------------------------------------------

extensions = ['sphinx.ext.autodoc',
              'sphinx.ext.autosummary',
              'sphinx.ext.mathjax',
              'sphinx.ext.napoleon']
templates_path = ['_templates']
exclude_patterns = []

autosummary_generate = True
autodoc_default_options = {
    'members': True,
    'exclude-members': '__dict__, __hash__, __module__, __slots__, '
                       '__weakref__'}

# Docstrings follow the NumPy convention.
napoleon_google_docstring = False
napoleon_numpy_docstring = True

# -- Options for HTML output -------------------------------------------

html_theme = 'pydata_sphinx_theme'
html_static_path = ['_static']
