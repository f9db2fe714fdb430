"""
BountyBoard - bug bounty missions with severity-tiered reward pools
"""
__version__ = "1.0.0"
