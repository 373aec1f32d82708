"""
Prometheus metrics for the coordination service.
"""
from prometheus_client import Counter, Histogram, Gauge, Info, CollectorRegistry
import psutil
import structlog
import os

log = structlog.get_logger()


class Metrics:
    """
    Centralized metrics for the coordination service.
    """

    def __init__(self, service_name: str = "meshcoord", version: str = "0.1.0", registry=None):
        self.service_name = service_name
        self.version = version
        self.registry = registry or CollectorRegistry()

        # HTTP Metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["service", "method", "path", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["service", "method", "path"],
            registry=self.registry,
        )

        self.http_requests_active = Gauge(
            "http_requests_active",
            "Number of active HTTP requests",
            ["service"],
            registry=self.registry,
        )
        self.http_requests_active.labels(service=service_name).set(0)

        # Application Info
        self.app_info = Info(
            "app",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({"service": service_name, "version": version})

        self.app_up = Gauge(
            "app_up",
            "Application up status (1=up, 0=down)",
            ["service", "version"],
            registry=self.registry,
        )
        self.app_up.labels(service=service_name, version=version).set(1)

        # Event log
        self.events_logged_total = Counter(
            "meshcoord_events_logged_total",
            "Total events appended to the log",
            ["event_type"],
            registry=self.registry,
        )

        self.events_rejected_total = Counter(
            "meshcoord_events_rejected_total",
            "Total events rejected before logging",
            ["reason"],
            registry=self.registry,
        )

        self.event_payload_bytes = Histogram(
            "meshcoord_event_payload_bytes",
            "Serialized event payload size in bytes",
            ["event_type"],
            buckets=(64, 256, 1024, 4096, 16384, 65536),
            registry=self.registry,
        )

        self.event_log_size = Gauge(
            "meshcoord_event_log_size",
            "Number of events held in the log",
            registry=self.registry,
        )

        # Node registry
        self.nodes_registered_total = Counter(
            "meshcoord_nodes_registered_total",
            "Total node registrations received",
            ["status"],
            registry=self.registry,
        )

        self.active_nodes = Gauge(
            "meshcoord_active_nodes",
            "Number of nodes currently marked Active",
            registry=self.registry,
        )

        # System Metrics
        self._setup_process_metrics()

    def _setup_process_metrics(self):
        """Set up process-level metrics using psutil."""
        self.process_cpu_seconds = Counter(
            "process_cpu_seconds_total",
            "Total CPU time consumed by process",
            ["service"],
            registry=self.registry,
        )

        self.process_memory_bytes = Gauge(
            "process_resident_memory_bytes",
            "Resident memory size in bytes",
            ["service"],
            registry=self.registry,
        )

        self.process_open_fds = Gauge(
            "process_open_fds",
            "Number of open file descriptors",
            ["service"],
            registry=self.registry,
        )

        self._last_cpu_total = 0.0
        self.update_system_metrics()

    def update_system_metrics(self):
        """Update system metrics from psutil."""
        try:
            process = psutil.Process(os.getpid())

            # Counters only go up, so feed the delta since the last sample
            cpu_times = process.cpu_times()
            cpu_total = cpu_times.user + cpu_times.system
            cpu_diff = cpu_total - self._last_cpu_total
            if cpu_diff > 0:
                self.process_cpu_seconds.labels(service=self.service_name).inc(cpu_diff)
            self._last_cpu_total = cpu_total

            memory_info = process.memory_info()
            self.process_memory_bytes.labels(service=self.service_name).set(memory_info.rss)

            # num_fds() is POSIX only
            if hasattr(process, "num_fds"):
                self.process_open_fds.labels(service=self.service_name).set(process.num_fds())

        except psutil.Error as e:
            log.warning("metrics.system_update_failed", error=str(e))

    def track_stores(self, event_log, node_registry):
        """
        Read store sizes at scrape time.

        Args:
            event_log: Log whose length backs meshcoord_event_log_size
            node_registry: Registry whose active count backs meshcoord_active_nodes
        """
        self.event_log_size.set_function(event_log.count)
        self.active_nodes.set_function(node_registry.count_active)

    def record_event_logged(self, event_type: str, size_bytes: int):
        """Record an accepted event."""
        self.events_logged_total.labels(event_type=event_type).inc()
        self.event_payload_bytes.labels(event_type=event_type).observe(size_bytes)

    def record_event_rejected(self, reason: str):
        """Record an event that was not logged."""
        self.events_rejected_total.labels(reason=reason).inc()

    def record_node_registered(self, status: str):
        """Record a node registration."""
        self.nodes_registered_total.labels(status=status).inc()
