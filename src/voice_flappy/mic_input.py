"""
mic_input.py: Microphone capture on a sounddevice callback thread.

The audio thread only writes the latest RMS level; the game loop reads one
snapshot per frame.
"""

import threading
from typing import Optional

import numpy as np

from .constants import MIC_BLOCK_SIZE, MIC_SAMPLE_RATE


def rms_level(block) -> float:
    """RMS amplitude of a block of float samples, clamped to [0, 1]."""
    samples = np.asarray(block, dtype=np.float32)
    if samples.size == 0:
        return 0.0
    rms = float(np.sqrt(np.mean(np.square(samples))))
    return min(max(rms, 0.0), 1.0)


class MicrophoneInput:
    def __init__(self, device: Optional[str] = None,
                 samplerate: Optional[int] = None,
                 blocksize: int = MIC_BLOCK_SIZE):
        self.device = device
        self.samplerate = samplerate
        self.blocksize = blocksize

        self.enabled = False
        self.stream = None
        self._level = 0.0
        self._level_lock = threading.Lock()

    def start(self) -> bool:
        """Opens the input stream. Returns False and stays disabled on failure."""
        try:
            # PortAudio is loaded at import time; a missing library raises OSError here.
            import sounddevice as sd
        except OSError as e:
            print(f"Microphone unavailable: {e}")
            return False

        samplerate = self.samplerate
        if samplerate is None:
            try:
                dev_info = sd.query_devices(self.device, kind='input')
                samplerate = int(dev_info['default_samplerate'])
            except (sd.PortAudioError, ValueError):
                samplerate = MIC_SAMPLE_RATE

        try:
            self.stream = sd.InputStream(callback=self._audio_callback,
                                         device=self.device,
                                         channels=1,
                                         samplerate=samplerate,
                                         blocksize=self.blocksize,
                                         dtype='float32')
            self.stream.start()
        except (sd.PortAudioError, ValueError) as e:
            print(f"Failed to start microphone stream: {e}")
            self.stream = None
            return False

        self.enabled = True
        print(f"Microphone stream started (samplerate: {samplerate})")
        return True

    def stop(self):
        if self.stream is not None:
            self.stream.stop()
            self.stream.close()
            self.stream = None
        self.enabled = False
        with self._level_lock:
            self._level = 0.0

    def _audio_callback(self, indata, frames, time_info, status):
        if status:
            print(f"Audio status: {status}")
        self.push_block(indata)

    def push_block(self, block):
        level = rms_level(block)
        with self._level_lock:
            self._level = level

    def get_level(self) -> float:
        """Latest level, or 0.0 while the microphone is disabled."""
        if not self.enabled:
            return 0.0
        with self._level_lock:
            return self._level
