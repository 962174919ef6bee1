"""
File Ripper - Core Package

Crawls a directory tree and ranks every file beneath it by how closely its
name matches a free-text query (Levenshtein edit distance).
"""

__version__ = "0.1.0"
__author__ = "File Ripper Team"
