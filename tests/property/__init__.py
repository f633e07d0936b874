"""
Scriptura - Property-Based Testing Suite

Property-based testing using Hypothesis for verse number ordering and the
invariants of the validation engine.
"""
