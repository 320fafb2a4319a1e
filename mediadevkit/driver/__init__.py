"""Driver wrappers with state tracking, and the driver manager."""