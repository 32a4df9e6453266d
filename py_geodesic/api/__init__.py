"""HTTP interface for serving network geometry."""
