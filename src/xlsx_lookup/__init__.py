"""xlsx-lookup: cached, indexed worksheet snapshots for repeated cell lookups."""

# Harden stdlib XML parsers against XXE, entity expansion bombs, and DTD
# retrieval *before* openpyxl is imported.
import defusedxml

defusedxml.defuse_stdlib()

__version__ = "0.3.0"
