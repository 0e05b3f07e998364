"""Routing — ordered, first-match-wins route table with reverse lookup.

Patterns are tokenized once when registered; each registration is tried
against the current request until one matches.
"""
