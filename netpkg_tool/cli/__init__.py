"""Command line interface for netpkg-tool"""
