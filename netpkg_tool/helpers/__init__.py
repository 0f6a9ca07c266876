"""Helper programs run as separate processes by the pipeline"""
