"""
Console view.

Components:
- render.py: turns the store's filtered view into text lines (pure functions)
- console.py: interactive loop; every change is followed by a full re-render
"""
