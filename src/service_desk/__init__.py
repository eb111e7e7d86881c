"""
Service Desk - classifies customer messages into reviews and failure reports.
"""

__version__ = "0.1.0"
