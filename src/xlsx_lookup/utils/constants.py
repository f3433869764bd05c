"""Cache key formats and application constants."""

# Cache keys: the host store sees only these two shapes
FRESHNESS_KEY_TEMPLATE = "ExcelChangedTimestampKey-[{path}]"
IDENTITY_KEY_TEMPLATE = "SheetKey-[{path}][{sheet}][{has_header}][{lookup_column}]"

# Memory management
MAX_MEMORY_MB = 500

# Supported file extensions (openpyxl reads OOXML workbooks only)
EXCEL_EXTENSIONS = {".xlsx", ".xlsm"}

# Environment / config names
ENV_MAX_MEMORY_MB = "XLSX_LOOKUP_MAX_MEMORY_MB"
CONFIG_MAX_MEMORY_MB = "max_memory_mb"
