"""
schemas/ — Pydantic request/response models for the dashboard template API

Provides input validation, the shared response envelopes, and the
camelCase wire shape of templates.
"""
