from .metrics import Counter, Histogram, cache_requests_total, http_request_latency_seconds

__all__ = ["Counter", "Histogram", "cache_requests_total", "http_request_latency_seconds"]
