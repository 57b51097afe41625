"""
Application package.
"""
