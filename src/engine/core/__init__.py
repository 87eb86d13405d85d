"""
どこで: `engine.core` サブパッケージ。
何を: フレーム駆動（Tickable/FrameClock/スケジューラ）・投影計算・描画ウィンドウを提供。
なぜ: 計算と描画の基盤を構成し、上位層（scene/render/api）から再利用可能にするため。
"""
