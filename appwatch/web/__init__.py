"""
Reference managed application served over HTTP.
"""
