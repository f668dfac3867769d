"""
jtd-validate: validate streams of JSON documents against a JSON Typedef schema.
"""

__version__ = "0.1.0"
