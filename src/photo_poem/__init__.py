"""
Photo Poem service package.

Provides:
- Clarifai concept labeling and OpenAI text/speech clients
- Poem, audio and health pipelines
- FastAPI HTTP surface
"""
