"""
bsptile.config - Configuracion por defecto del WM.

Este paquete contiene:
    - settings    : Eje de division inicial, output de respaldo, logging
    - keybindings : Atajos de teclado por defecto y su registro
"""
