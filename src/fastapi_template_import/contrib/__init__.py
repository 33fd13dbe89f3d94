"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-03-09
@Docs: Optional persistence backends.
可选持久化后端。
"""
