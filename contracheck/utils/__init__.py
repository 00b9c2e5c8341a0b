"""Hashing and file helpers"""
