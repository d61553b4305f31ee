"""
Campaign Builder 应用层
"""
