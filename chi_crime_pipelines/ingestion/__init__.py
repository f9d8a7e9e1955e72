"""
Raw data ingestion for the crime CSV.
"""
