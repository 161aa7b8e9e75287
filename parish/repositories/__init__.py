"""
Persistence adapters.

Content lives in flat JSON files under the data directory. Services depend on
``CMSRepository`` rather than touching the files directly.
"""
