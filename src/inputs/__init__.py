"""Input sources publishing onto a window's EventBus"""
