# Ramps are ordered dark -> light (low intensity -> high intensity)
ASCII = " .-~+*%#@"

BLOCK = " ░▒▓"

# Uncoloured pixel ramp; coloured output uses the half block alone and lets
# foreground/background carry the top and bottom pixel
PIXEL = " ▀▞▟█"
PIXEL_COLOUR = "▀"

# Braille grid: column follows the top pixel, row follows the bottom pixel
BRAILLS = (
    " ⠁⠉⠓⠛",
    "⠄⠅⠩⠝⠟",
    "⠤⠥⠭⠯⠽",
    "⠴⠵⠽⠾⠿",
    "⠶⠾⠾⠿⠿",
)

DOTS = " ⠂⠒⠕⠞⠟⠿"
