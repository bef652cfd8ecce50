"""
Bixo client: typed access to the Bixo recruitment marketplace API.
"""
__version__ = "1.0.0"
