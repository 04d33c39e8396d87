"""Service layer for Slidemill."""
