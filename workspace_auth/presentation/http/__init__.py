"""HTTP Presentation Layer."""
