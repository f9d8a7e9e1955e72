"""
Pipelines for the Chicago crime exploratory report (2012-2016).
"""
