"""
CLI command groups — thin wrappers over ``toli_formula.core``.
"""
