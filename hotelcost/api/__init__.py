"""HTTP interface for the hotelcost estimator."""
