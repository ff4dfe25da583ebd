"""Service Layer: blocking storage operations run inside the worker pool."""
