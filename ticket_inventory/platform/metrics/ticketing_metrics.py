from prometheus_client import Counter, Histogram


class TicketingMetrics:
    """
    Ticket inventory metrics collector

    Tracks purchase outcomes and sold seats so that oversell pressure
    (capacity rejections) is visible next to throughput.
    """

    def __init__(self):
        # ========== Purchase Metrics ==========
        self.purchase_requests = Counter(
            'ticket_purchase_requests_total',
            'Total ticket purchase attempts',
            ['result'],  # result: success/replayed/insufficient_capacity/...
        )

        self.purchase_duration = Histogram(
            'ticket_purchase_duration_seconds',
            'Ticket purchase processing time',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.tickets_sold = Counter(
            'tickets_sold_total',
            'Seats sold across all committed purchases',
        )

    # ========== Helper Methods ==========

    def record_purchase(self, *, result: str, duration: float) -> None:
        self.purchase_requests.labels(result=result).inc()
        self.purchase_duration.labels(result=result).observe(duration)

    def record_tickets_sold(self, *, quantity: int) -> None:
        self.tickets_sold.inc(quantity)


# Global metrics instance
metrics = TicketingMetrics()
