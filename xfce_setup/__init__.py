# Gentoo-Xfce-Setup/xfce_setup/__init__.py
