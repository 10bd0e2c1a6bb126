"""Dispatcher core: invocation context, flag parsing and routing."""
