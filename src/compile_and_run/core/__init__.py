"""Core: configuration, toolchains, process invocation and console output"""
