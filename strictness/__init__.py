"""
Strictness analysis by abstract interpretation over the two-point domain.
"""
