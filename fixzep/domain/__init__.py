"""Client-side domain models and stores"""
