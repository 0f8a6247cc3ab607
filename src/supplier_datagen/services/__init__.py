"""Output services for the supplier data generator."""
