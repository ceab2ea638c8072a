"""core/ -- Kernel: configuration, errors, database engine. No reverse dependencies."""
