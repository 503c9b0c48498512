"""
Storage tooling for HDInsight clusters backed by Azure Blob Storage.
"""

__version__ = "0.3.0"
