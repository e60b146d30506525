"""Core rule engine: browsers, rules, resolution, configuration"""
