"""
Game rules for dsa-cli: derived attributes, dice, modifiers, skill checks
and session gauges.
"""
