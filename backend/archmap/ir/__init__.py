# Architecture model and diagnostics shared by extraction, synthesis and rendering
