"""Adapters around external executables (Asciidoctor, rbenv, RVM)."""
