"""
Automation scripts for Service Desk.
"""

from service_desk.automations.batch_importer import BatchImporter, BatchResult, decode_batch

__all__ = [
    "BatchImporter",
    "BatchResult",
    "decode_batch",
]
