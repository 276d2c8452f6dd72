"""
Operator scripts
Each module exposes main() returning a process exit code
"""
