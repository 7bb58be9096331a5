"""
Command-line interface for the Picado client.
"""
