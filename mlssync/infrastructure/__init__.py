"""Infrastructure adapters: persistence, HTTP, RESO feed and observability."""
