"""
AI Clinic: clinical assistance proxy

Accepts symptom-check, prescription-explain and risk-flag requests from the
clinic front end and answers them through an OpenAI-compatible AI gateway.
"""

__version__ = "0.1.0"
__author__ = "Clinic-AI Team"
__description__ = "Clinical assistance proxy for an OpenAI-compatible AI gateway"
