"""External command plumbing for kubectl and kind."""
