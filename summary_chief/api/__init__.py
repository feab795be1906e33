"""HTTP API for the scheduler"""
