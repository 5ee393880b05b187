"""
Calculator Version

Stamped on every batch output row as calculator_version. Bump when the rate
table or eligibility rules change.
"""

VERSION = "2026.10.19"
