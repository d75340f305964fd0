"""
aisbreaker-stability 测试套件

测试目录结构:
    tests/
    ├── __init__.py
    ├── conftest.py                         # pytest fixtures
    ├── test_cli.py                         # CLI 入口测试
    ├── test_config.py                      # 配置加载测试
    ├── test_models.py                      # 异常类型测试
    ├── api/test_api_models.py              # 规范化模型测试
    ├── services/test_stability_service.py  # 文生图服务测试
    ├── services/clients/                   # HTTP 客户端测试
    └── utils/                              # 写盘与计时工具测试
"""
