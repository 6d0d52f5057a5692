"""
Logistica Server
Backend transacional de frota, motoristas, fretes, custos, fazendas e pagamentos
"""
__version__ = "1.0.0"
