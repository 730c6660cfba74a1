"""
Поверхность для рисования поверх pygame.

Холст живёт между тиками (как canvas в браузере): игровой цикл
рисует в него только на тиках, а окно каждый кадр просто копирует его.
"""
import pygame

from config import WIDTH, HEIGHT, BACKGROUND


class PygameSurface:
    def __init__(self, width=WIDTH, height=HEIGHT, background=BACKGROUND):
        self.width = width
        self.height = height
        self.background = background
        self.canvas = pygame.Surface((width, height))
        self.canvas.fill(background)
        self._fonts = {}

    def font(self, size):
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont('arial', size)
        return self._fonts[size]

    def fill_rect(self, x, y, width, height, color):
        pygame.draw.rect(self.canvas, color, pygame.Rect(int(x), int(y), int(width), int(height)))

    def fill_circle(self, center_x, center_y, radius, color):
        pygame.draw.circle(self.canvas, color, (int(center_x), int(center_y)), int(radius))

    def clear(self):
        self.canvas.fill(self.background)

    def draw_text(self, text, x, y, size, color, align="left"):
        """align: left - (x, y) левый верхний угол, center - центр,
        baseline - y это базовая линия, как у fillText в canvas"""
        font = self.font(size)
        surf = font.render(text, True, color)
        rect = surf.get_rect()
        if align == "center":
            rect.center = (int(x), int(y))
        elif align == "baseline":
            rect.topleft = (int(x), int(y) - font.get_ascent())
        else:
            rect.topleft = (int(x), int(y))
        self.canvas.blit(surf, rect)

    def blit_to(self, screen, position=(0, 0)):
        screen.blit(self.canvas, position)
