"""Core App Tests"""
