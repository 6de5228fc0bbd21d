"""
datefilter dev API server
"""
