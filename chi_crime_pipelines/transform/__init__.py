"""
Transformation stages: cleaning, temporal features, filters, aggregation.
"""
