"""
Report layer: summary tables, charts and density maps.
"""
