"""Playback controller: the state and rules behind the video player window."""

from __future__ import annotations

from typing import Protocol

DEFAULT_VOLUME = 50
SPEEDS = (0.5, 1.0, 1.5, 2.0)
POSITION_INTERVAL_MS = 100
VIDEO_FILE_PATTERNS = ("*.mp4", "*.avi", "*.mkv")
_MS_PER_DAY = 24 * 60 * 60 * 1000

PLAY_ICON = "play"
PAUSE_ICON = "stop"
SOUND_ICON = "sound"
MUTE_ICON = "mute"


class MediaBackend(Protocol):
    """What the controller needs from a media player."""

    duration: int
    position: int
    playing: bool

    def set_source(self, path: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def set_position(self, position: int) -> None: ...

    def set_playback_rate(self, rate: float) -> None: ...

    def set_volume(self, volume: float) -> None: ...


def format_clock(milliseconds: int) -> str:
    """Format a time offset as mm:ss, wrapping at a day like a clock."""
    seconds = (milliseconds % _MS_PER_DAY) // 1000
    return f"{(seconds // 60) % 60:02d}:{seconds % 60:02d}"


def _clock_at(position: int) -> str:
    if not 0 <= position < _MS_PER_DAY:
        return ""
    return format_clock(position)


class PlayerController:
    """Drives a MediaBackend from the player's buttons and sliders."""

    def __init__(self, backend: MediaBackend) -> None:
        self.backend = backend
        self.volume = DEFAULT_VOLUME
        self.muted = False
        self.playing = False
        self.play_enabled = False
        self.fullscreen = False
        self.speed = 1.0
        self.progress = 0
        self.dragging = False
        self.timer_running = False
        self.source: str | None = None
        self.play_icon = PLAY_ICON
        self.voice_icon = SOUND_ICON
        self._was_playing = False
        self._current = "00:00"
        self._total = ""
        self._label = "00:00/00:00"
        backend.set_playback_rate(self.speed)
        backend.set_volume(self.volume / 100.0)

    def time_label(self) -> str:
        """Text of the elapsed/total time label."""
        return self._label

    def _show_time(self, position: int) -> None:
        self._current = _clock_at(position)
        self._label = f"{self._current}/{self._total}"

    def on_duration_changed(self, duration: int) -> None:
        self._total = format_clock(duration)
        self._label = f"{self._current}/{self._total}"

    def on_position_changed(self, position: int) -> None:
        if self.dragging:
            return
        duration = self.backend.duration
        if duration <= 0:
            return
        self.progress = int(position * 100.0 / duration)
        self._show_time(position)

    def load(self, path: str | None) -> bool:
        """Open and start playing a file; returns False when none was chosen."""
        if not path:
            return False
        self.source = path
        self.backend.set_source(path)
        self.backend.play()
        self.playing = True
        self.play_enabled = True
        self.play_icon = PAUSE_ICON
        return True

    def toggle_play(self) -> None:
        if not self.play_enabled:
            return
        self.playing = not self.playing
        if self.playing:
            self.backend.play()
            self.play_icon = PAUSE_ICON
            self.timer_running = True
        else:
            self.backend.pause()
            self.play_icon = PLAY_ICON
            self.timer_running = False

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen

    def escape(self) -> bool:
        """Leave full screen; returns whether the key was handled."""
        if not self.fullscreen:
            return False
        self.fullscreen = False
        return True

    def set_playback_speed(self, speed: float) -> None:
        self.speed = speed
        self.backend.set_playback_rate(speed)

    def toggle_mute(self) -> None:
        self.muted = not self.muted
        if self.muted:
            self.backend.set_volume(0.0)
            self.voice_icon = MUTE_ICON
        else:
            self.backend.set_volume(self.volume / 100.0)
            self.voice_icon = SOUND_ICON

    def set_volume(self, volume: int) -> None:
        """Apply a volume slider value in the range 0 to 100."""
        volume = max(0, min(100, volume))
        self.volume = volume
        if not self.muted:
            self.backend.set_volume(volume / 100.0)
        self.muted = volume == 0
        self.voice_icon = MUTE_ICON if self.muted else SOUND_ICON

    def _seek(self, percent: int) -> None:
        duration = self.backend.duration
        if duration <= 0:
            return
        target = int(percent * duration / 100.0)
        self.backend.set_position(target)
        self._show_time(target)

    def seek_percent(self, percent: int) -> None:
        """Move the progress slider to ``percent`` and seek there."""
        self.progress = max(0, min(100, percent))
        self._seek(self.progress)

    def slider_pressed(self) -> None:
        self.dragging = True
        self._was_playing = self.backend.playing
        if self._was_playing:
            self.backend.pause()

    def slider_released(self) -> None:
        self.dragging = False
        if self._was_playing:
            self.backend.play()

    def jump_to(self, percent: int) -> None:
        """Seek to a point clicked on the progress track."""
        self._seek(percent)

    def tick(self) -> None:
        """Periodic position refresh while playing."""
        if self.backend.playing:
            self.on_position_changed(self.backend.position)