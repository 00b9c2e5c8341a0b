"""Annotation translation"""
