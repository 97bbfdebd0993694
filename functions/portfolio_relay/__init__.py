"""
Portfolio relay backend.

A small FastAPI service that forwards contact-form submissions as email and
proxies Google Analytics and WakaTime data for a portfolio frontend.
"""
