"""
Tokenmaker modules package.
"""
