"""
Generators — produce output files from the formula context.

Each generator module exposes a ``render()``-style function returning
text; writing it to disk is left to ``services.formula_writer``.
"""
