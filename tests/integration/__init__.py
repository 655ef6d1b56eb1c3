"""
Integration tests for tableqa.

Exercise the full CSV -> table -> connector -> HTTP path, including a real
local socket for the timeout bound.
"""
