"""
Configuration management for the CMS.

Contains Pydantic settings and logging setup that work across local-dev,
aws-mock, and aws-prod deployment modes.
"""
