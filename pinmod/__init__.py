"""pinmod - 单工具模块描述文件 (.mod) 读写"""

__version__ = "0.3.0"
