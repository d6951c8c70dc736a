"""Core building blocks of the vehicle catalog ingestion pipeline."""
