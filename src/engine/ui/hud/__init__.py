"""
どこで: `engine.ui.hud` パッケージ。
何を: メトリクス/メッセージのオーバーレイ表示（`overlay.OverlayHUD`）。
なぜ: pyglet 依存を HUD 表示に閉じ込め、パッケージ import 時の副作用を避けるため。
"""
