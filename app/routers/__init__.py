"""
routers/ — FastAPI route modules.

Routers stay thin: parse and validate input, call services/, and hand
the outcome to dashboard_responses for the JSON envelope.
"""
