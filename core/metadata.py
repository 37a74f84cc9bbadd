"""
QuantHub Core Metadata
----------------------
Project identity shared by the backend, the health report and the UI sidebar.
"""

__project__ = "QuantHub"
__version__ = "0.4.0"
