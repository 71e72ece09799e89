"""
Article Locator: path-derived PDF index with lookup by article and print version.

Scans a directory tree for documents whose paths carry an article number and a
print version, keeps the result in a single-file SQLite index, and resolves
article/version pairs (typed by hand or passed in from a spreadsheet cell) to
the matching files or, failing that, to the article's folder.
"""

__version__ = "0.1.0"
