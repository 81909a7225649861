"""
Bot bootstrap: configuration and client.
"""
