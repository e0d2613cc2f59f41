"""
ena-fetch: resolve SRA/ENA/DDBJ run accessions into FASTQ download metadata.
"""

__version__ = "0.3.0"
