# Test package for ghg_engine; run with `pytest` from the project root.
