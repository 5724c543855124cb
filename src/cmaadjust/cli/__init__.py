"""
Command-line interface modules.

Provides CLI entry points for:
- calculate: Price comparables from a JSON file
- api_server: Start the REST API
"""
