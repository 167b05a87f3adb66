"""Web 层 - Flask HTTP API"""
