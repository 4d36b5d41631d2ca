"""
Sarkari Yojana Eligibility Engine

Helps a citizen find the welfare schemes they qualify for. Keeps a local
scheme catalog, caches AI eligibility analyses by profile fingerprint and
exposes the whole thing over a small HTTP API.
"""

__version__ = "1.0.0"
__author__ = "Sarkari Yojana Team"
__description__ = "AI-assisted welfare scheme eligibility with a local scheme catalog"
