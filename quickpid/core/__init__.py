"""Settings, data recording and the closed-loop simulation orchestrator."""
