"""Core: dominio, configuración y servicios de resolución de URLs."""
