"""Configuration package for the Summary Chief scheduler"""
