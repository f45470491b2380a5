"""
范围证明验证服务
Flask HTTP服务器、requests客户端和JSON序列化工具
"""
