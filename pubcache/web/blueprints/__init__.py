"""Flask Blueprints"""
