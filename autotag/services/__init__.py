"""Application services.

Services implement the tagging decision, coordinating between the core
types and the GitHub adapters.
"""
