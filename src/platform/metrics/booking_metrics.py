from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Booking Service Core Metrics Collector

    Tracks the seat hold lifecycle: claims, bookings, expiries, and the
    deferred tasks that drive them.
    """

    def __init__(self) -> None:
        # ========== Seat Reservation Metrics ==========
        self.seat_claims = Counter(
            'seat_claims_total',
            'Seat claim attempts',
            ['result'],  # claimed / conflict
        )

        self.seat_claim_duration = Histogram(
            'seat_claim_duration_seconds',
            'Seat claim round trip to Kvrocks',
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

        self.seat_releases = Counter(
            'seat_releases_total',
            'Seats released back to the pool',
            ['reason'],  # expired / rollback
        )

        # ========== Booking Metrics ==========
        self.bookings_created = Counter('bookings_created_total', 'Bookings created')

        self.bookings_paid = Counter('bookings_paid_total', 'Bookings marked as paid')

        self.bookings_expired = Counter(
            'bookings_expired_total', 'Unpaid bookings removed after the hold window'
        )

        # ========== Deferred Task Metrics ==========
        self.deferred_tasks_scheduled = Counter(
            'deferred_tasks_scheduled_total', 'Deferred tasks enqueued', ['handler']
        )

        self.deferred_tasks_processed = Counter(
            'deferred_tasks_processed_total',
            'Deferred tasks executed by the worker',
            ['handler', 'result'],  # success / retry / dropped
        )

    # ========== Helper Methods ==========

    def record_seat_claim(self, *, result: str, duration: float) -> None:
        self.seat_claims.labels(result=result).inc()
        self.seat_claim_duration.observe(duration)

    def record_seat_release(self, *, reason: str, count: int) -> None:
        self.seat_releases.labels(reason=reason).inc(count)

    def record_deferred_task(self, *, handler: str, result: str) -> None:
        self.deferred_tasks_processed.labels(handler=handler, result=result).inc()


# Global metrics instance
metrics = BookingMetrics()
