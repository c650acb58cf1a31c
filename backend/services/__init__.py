"""
Infrastructure services for the arcade snake engine.
"""
