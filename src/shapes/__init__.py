"""
どこで: `shapes` パッケージ。
何を: 球面点群（ノード配置と隣接）の生成器を公開する。
なぜ: 生成ステージを描画/シーン層から分離し、単体で検証できるようにするため。
"""

from .sphere import Node, SphereNetwork, build_adjacency, fibonacci_sphere, generate_sphere

__all__ = [
    "Node",
    "SphereNetwork",
    "build_adjacency",
    "fibonacci_sphere",
    "generate_sphere",
]
