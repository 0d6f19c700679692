"""Recursive expansion engine.

The classifier decides whether a value is a registered object, a collection
of expandable elements, a blind object or an opaque leaf; the expander walks
the source graph accordingly, narrowing the include paths at every level.
"""
