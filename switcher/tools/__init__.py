"""Side-effecting tools (process launch)"""
