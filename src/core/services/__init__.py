"""Servicios del Core: resolver, descriptores, rewriter e instalador."""
