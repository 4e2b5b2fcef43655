"""
Service layer package marker.
"""
