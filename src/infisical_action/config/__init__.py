"""
Configuration for the export action: inputs manifest and logging.
"""
