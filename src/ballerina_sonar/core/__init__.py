"""Configuration shared by the catalog, definitions and scanner layers."""
