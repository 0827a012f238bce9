"""
Format definitions sub-package for tconv.

Contains the YAML data behind the layout registry:
- named.yaml: canonical format names -> reference layouts, plus the
  three epoch formats.
- guess_rules.yaml: the ordered rules used to guess an input format.

The loader module (layout_registry.py in the parent package) reads these
files at runtime.
"""
