"""Movie table ETL: loading, cleaning, scoring and export."""
